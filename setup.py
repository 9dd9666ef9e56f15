from setuptools import setup, find_packages

setup(
    name="mcmcscan",
    version="0.1.0",
    author="mcmcscan developers",
    description="Adaptive ensemble MCMC scans with simulated annealing",
    packages=find_packages(include=["mcmcscan", "mcmcscan.*"]),
    python_requires=">=3.8",
    install_requires=[
        "numpy",
        "scipy",
    ],
    extras_require={
        "test": ["pytest"],
    },
)
