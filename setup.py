# setup.py
from setuptools import setup, find_namespace_packages

setup(
    name="repovisualizer",
    version="1.0.0",
    description="Containment graph and annotated paginated report from a flat repository listing",
    author="Enrique Paredes",
    author_email="eparedesbalen@gmail.com",
    package_dir={"": "src"},
    packages=find_namespace_packages(where="src", include=["repovisualizer*"]),  # Sub-packages without __init__.py
    python_requires=">=3.8",
    install_requires=[
        "requests",  # GitHub tree API client
    ],
    extras_require={
        "test": ["pytest"],
    },
    entry_points={
        'console_scripts': [
            'repovisualizer=repovisualizer.main:main',
        ],
    },
    classifiers=[
        "Programming Language :: Python :: 3",
        "Operating System :: OS Independent",
    ],
)
