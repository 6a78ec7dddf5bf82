import setuptools

with open("README.md", "r") as fh:
    long_description = fh.read()

setuptools.setup(
    name="fwsplit",
    version="0.0.1",
    author="Gianluca Pacchiella",
    author_email="gp@ktln2.org",
    description="Split firmware images into parts and join them back",
    long_description=long_description,
    long_description_content_type="text/markdown",
    url="https://github.com/gipi/fwsplit",
    packages=setuptools.find_packages(exclude=["tests"]),
    scripts=["scripts/firmware_tool.py"],
    install_requires=[],
    extras_require={
        "test": ["pytest"],
    },
    python_requires=">=3.8",
    classifiers=[
        "Programming Language :: Python :: 3",
        "License :: OSI Approved :: GPLv2 License",
        "Operating System :: OS Independent",
    ],
)
