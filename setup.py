from setuptools import find_packages, setup

setup(
    name="transcriptolab",
    version="0.1.0",
    description="Direct-collocation transcription for optimal control using Legendre-Gauss-Radau",
    author="TranscriptoLab Authors",
    packages=find_packages(exclude=["tests", "tests.*"]),
    install_requires=[
        "numpy>=1.22.0",
        "scipy>=1.8.0",  # Gauss-Jacobi root finding for the Radau basis
        "casadi>=3.6.0",  # Symbolic trial matrices for NLP assembly
    ],
    extras_require={
        "tests": ["pytest>=7.0"],
    },
    python_requires=">=3.10",
    classifiers=[
        "Development Status :: 3 - Alpha",
        "Intended Audience :: Science/Research",
        "Topic :: Scientific/Engineering :: Mathematics",
        "License :: OSI Approved :: MIT License",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
        "Programming Language :: Python :: 3.13",
    ],
    keywords="optimal control, trajectory optimization, collocation, pseudospectral methods",
)
