from setuptools import setup, find_packages

setup(
    name="spikenet",
    version="0.1.0",
    description="Layered spiking neural network simulator (AdEx, Izhikevich, LIF)",
    packages=find_packages(include=["spikenet", "spikenet.*"]),
    python_requires=">=3.8",
    install_requires=[
        "numpy",
        "scipy",
        "matplotlib",
    ],
    extras_require={
        "test": [
            "pytest",
        ],
    },
)
