from setuptools import setup, find_packages

setup(
    name="tflite_metadump",
    version="0.1.0",
    description="Print the metadata embedded in TensorFlow Lite models",
    author="tflite-metadump developers",
    python_requires=">=3.8,<4.0",
    packages=find_packages(exclude=["tests*", "docs*"]),
    install_requires=[
        # Core dependencies
        "flatbuffers>=2.0",
        "numpy>=1.19.0,<3.0.0",
    ],
    extras_require={
        # Development dependencies
        "dev": [
            "pytest>=7.0.0,<9.0.0",
            "pytest-cov>=4.0.0,<6.0.0",
            "pytest-mock>=3.0.0,<4.0.0",
            "black>=23.0.0,<25.0.0",
            "isort>=5.0.0,<6.0.0",
            "mypy>=0.800,<2.0.0",
            "flake8>=4.0.0,<8.0.0",
        ],
    },
    entry_points={
        "console_scripts": [
            "tflite-metadump=tflite_metadump.cli.main:main",
        ],
    },
    classifiers=[
        "Development Status :: 3 - Alpha",
        "Intended Audience :: Developers",
        "Intended Audience :: Science/Research",
        "Topic :: Scientific/Engineering :: Artificial Intelligence",
        "Topic :: Utilities",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.8",
        "Programming Language :: Python :: 3.9",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "License :: OSI Approved :: MIT License",
    ],
)
