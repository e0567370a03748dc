from os import path

from setuptools import setup

this_dir = path.abspath(path.dirname(__file__))
with open(path.join(this_dir, "README.md")) as f:
    long_description = f.read()

setup(
    name="cqrepo",
    description="cqrepo - command/query object repository over SQLAlchemy sessions",
    long_description=long_description,
    long_description_content_type="text/markdown",
    version="0.1",
    license="MIT",
    packages=["cqrepo", "cqrepo.core", "cqrepo.test"],
    package_data={
        "cqrepo": ["py.typed"],
        "cqrepo.core": ["py.typed"],
        "cqrepo.test": ["py.typed"],
    },
    keywords=["repository", "unit-of-work", "cqrs", "sqlalchemy"],
    python_requires=">=3.9",
    install_requires=[
        "sqlalchemy>=2.0",
        "uvicorn",
    ],
    extras_require={
        "test": [
            "pytest",
            "pytest-asyncio",
        ],
    },
    classifiers=[
        "Development Status :: 3 - Alpha",
        "Intended Audience :: Developers",
        "Topic :: Database",
        "License :: OSI Approved :: MIT License",
        "Programming Language :: Python :: 3.9",
    ],
)
