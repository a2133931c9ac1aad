from setuptools import setup, find_packages

with open("README.md", "r", encoding="utf-8") as fh:
    long_description = fh.read()

setup(
    name="pysedflow",
    version="0.1.0",
    author="Boris Gailleton",
    author_email="boris.gailleton@univ-rennes.fr",
    description="Real-time coupled water and soil transport on the GPU, with a live terrain brush",
    long_description=long_description,
    long_description_content_type="text/markdown",
    packages=find_packages(include=["pysedflow", "pysedflow.*"]),
    py_modules=["run"],
    entry_points={"console_scripts": ["pysedflow=run:main"]},
    python_requires=">=3.9",
    install_requires=[
        "taichi>=1.6.0",
        "numpy>=1.20.0",
        "matplotlib>=3.5.0",
    ],
    extras_require={
        "dev": [
            "pytest>=6.0",
            "pytest-cov",
            "black",
            "flake8",
        ],
    },
    classifiers=[
        "Development Status :: 3 - Alpha",
        "Environment :: GPU",
        "Intended Audience :: Science/Research",
        "Intended Audience :: Education",
        "License :: OSI Approved :: MIT License",
        "Programming Language :: Python :: 3",
        "Topic :: Scientific/Engineering :: Hydrology",
        "Topic :: Scientific/Engineering :: Visualization",
    ],
    keywords="sediment transport erosion shallow water sandbox GPU taichi real-time",
)
