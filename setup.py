
from setuptools import setup, find_packages

setup(
    name="pystrat",
    version="0.1.0",
    packages=find_packages(exclude=["test", "test.*"]),
    python_requires=">=3.10",
    install_requires=["numpy", "scipy", "pandas", "matplotlib", "seaborn"],
    extras_require={"test": ["pytest"]},
    author="Your Name",
    description="Post-stratification survey analysis with jackknife standard errors",
    license="MIT",
    classifiers=[
        "Programming Language :: Python :: 3",
        "License :: OSI Approved :: MIT License"
    ]
)
