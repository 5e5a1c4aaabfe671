# Copyright Amazon.com, Inc. or its affiliates. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
#
import setuptools

with open("README.md", "r", encoding="utf-8") as fh:
    long_description = fh.read()


with open("VERSION", "r", encoding="utf-8") as version_file:
    version = version_file.read().strip()


setuptools.setup(
    name="cfn-stackset",
    version=version,
    author="AWS",
    license="Apache-2.0",
    description="CloudFormation StackSet resource and data source",
    long_description=long_description,
    long_description_content_type="text/markdown",
    classifiers=[
        "Programming Language :: Python :: 3.11",
        "License :: OSI Approved :: Apache Software License",
        "Operating System :: OS Independent",
    ],
    package_dir={"": "src"},
    packages=setuptools.find_packages(where="src", exclude=["tests"]),
    package_data={"cfnstackset": ["validation/*.yaml"]},
    python_requires=">=3.11",
    install_requires=[
        "PyYAML>=5.3.1",
        "pykwalify>=1.8.0",
        "boto3>=1.28.17",
        "botocore>=1.31.17",
    ],
    extras_require={
        "test": [
            "mock>=4.0.3",
            "moto[cloudformation]>=4.2.14,<5",
            "pytest>=7.0",
        ],
        "dev": [
            "isort",
            "black",
            "pre-commit",
        ],
    },
)
