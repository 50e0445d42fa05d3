import setuptools

setuptools.setup(
    name="capacity-coverage",
    version="0.1.0",
    description=(
        "Reconciles running EC2 instances against Reserved Instances and "
        "reports coverage per instance type and per family"
    ),
    python_requires=">=3.10",
    packages=setuptools.find_packages(exclude=("tests*",)),
    install_requires=[
        "pydantic>2.0",
        "boto3",
        "tabulate",
    ],
    extras_require={
        "test": ["pytest", "hypothesis"],
    },
    classifiers=[
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
        "License :: OSI Approved :: Apache Software License",
        "Operating System :: OS Independent",
    ],
    entry_points={
        "console_scripts": [
            "ri-coverage = capacity_coverage.tools.coverage_report:cli",
        ]
    },
)
