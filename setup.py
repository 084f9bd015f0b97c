from setuptools import setup, find_packages

setup(
    name="pypointcloud",
    version="0.1",
    packages=find_packages(exclude=["tests", "tests.*"]),
    install_requires=[
        'numpy',
        'scipy',
    ],
    extras_require={
        'open3d': ['open3d'],
        'test': ['pytest'],
    },
)
