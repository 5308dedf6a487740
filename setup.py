import pathlib

import setuptools

here = pathlib.Path(__file__).parent.resolve()

long_description = (here / "README.md").read_text(encoding="utf-8")

setuptools.setup(
    name="ethereum-tx-types",
    version="0.1.0",
    description="Legacy, EIP-2930 and EIP-1559 Ethereum transaction data model",
    long_description=long_description,
    long_description_content_type="text/markdown",
    license="MIT",
    python_requires=">=3.10",
    packages=setuptools.find_packages(include=["ethereum_tx_*"]),
    package_data={"ethereum_tx_config": ["templates/*.j2"]},
    install_requires=[
        "click>=8.1.0,<9",
        "ethereum-rlp>=0.1.1",
        "ethereum-types>=0.2.1",
        "jinja2>=3,<4",
        "pycryptodome>=3.20.0,<4",
        "pydantic>=2.6.0,<3",
        "pyyaml>=6.0.2,<7",
    ],
    extras_require={
        "test": [
            "pytest>=8",
        ],
    },
    entry_points={
        "console_scripts": [
            "ethtx=ethereum_tx_cli.main:ethtx",
        ],
    },
)
