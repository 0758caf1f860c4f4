# setup.py
from setuptools import setup, find_packages

install_requires = [
    # --- MODELS & CONFIG ---
    "pydantic>=2.0.0",
    "python-dotenv>=1.0.0",
    "pyyaml>=6.0.0",

    # --- DATABASE ---
    "duckdb>=0.10.0",
]

setup(
    name="BuyWay_Storefront",
    version="0.1.0",
    description="BuyWay|Storefront reactive state layer",
    packages=find_packages(exclude=["tests", "tests.*"]),
    package_data={"buyway.data": ["*.yaml"]},
    include_package_data=True,
    install_requires=install_requires,
    extras_require={
        # --- TESTS---
        "test": [
            "pytest-asyncio==1.3.0",
            "pytest",
        ],
    },
    python_requires=">=3.11",
)
