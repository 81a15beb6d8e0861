from setuptools import find_packages, setup

setup(
    name="clonalsim",
    version="0.1.0",
    description="Simulation of tumor clonal evolution and multi-sample "
    "variant allele frequencies",
    package_dir={"": "src"},
    packages=find_packages("src"),
    python_requires=">=3.9",
    install_requires=[
        "matplotlib>=3.4",
        "networkx>=2.5",
        "numpy>=1.22",
        "pandas>=1.1",
        "tqdm>=4",
    ],
    extras_require={"test": ["pytest>=6"]},
    entry_points={
        "console_scripts": [
            "clonalsim-simulate=clonalsim.pipeline.clonalsim_simulate:main",
        ],
    },
)
