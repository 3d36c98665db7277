"""
python -m build
twine upload dist/*
"""

from setuptools import setup, find_packages


def otter_setup():
    with open("requirements.txt", "rt") as fp:
        install_requires = fp.read().strip().split("\n")

    version = "0.4.0"

    setup(
        name="otter-admin",
        packages=find_packages(exclude=["tests", "tests.*"]),
        version=version,
        license="MIT",
        description="otter : relationship-aware JSON envelopes for SQLAlchemy admin dashboards",
        long_description=open("README.rst").read(),
        keywords=["SqlAlchemy", "Flask", "REST", "admin", "dashboard", "relationships"],
        python_requires=">=3.8, <4",
        install_requires=install_requires,
        classifiers=[
            "Development Status :: 3 - Alpha",
            "License :: OSI Approved :: MIT License",
            "Intended Audience :: Developers",
            "Framework :: Flask",
            "Topic :: Software Development :: Libraries",
            "Environment :: Web Environment",
            "Programming Language :: Python :: 3",
        ],
        extras_require={"test": ["pytest>=7.0"]},
    )


otter_setup()  # pragma: no cover
