import setuptools

with open("README.md", "r") as fh:
    long_description = fh.read()

setuptools.setup(
    name="gffstruct",
    version="0.0.1",
    author="Gianluca Pacchiella",
    author_email="gp@ktln2.org",
    description="Lazy decoder for the Aurora GFF file format",
    long_description=long_description,
    long_description_content_type="text/markdown",
    url="https://github.com/gipi/gffstruct",
    packages=setuptools.find_packages(exclude=['tests', 'tests.*']),
    install_requires=[
        'bitstring',
    ],
    extras_require={
        'test': [
            'pytest',
        ],
    },
    classifiers=[
        "Programming Language :: Python :: 3",
        "License :: OSI Approved :: GNU General Public License v2 (GPLv2)",
        "Operating System :: OS Independent",
    ],
)
