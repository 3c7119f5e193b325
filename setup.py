from setuptools import find_packages, setup

setup(
    name="md2kindle",
    version="0.1.0",
    packages=find_packages(exclude=["tests", "tests.*"]),
    python_requires=">=3.10",
    install_requires=[
        "requests",
        "python-dotenv",
        "colorama>=0.4.6",
        # Conversion
        "Markdown>=3.4",
        "EbookLib>=0.18",
    ],
    extras_require={
        "test": ["pytest"],
    },
    entry_points={
        "console_scripts": [
            "md2kindle=md2kindle.main:main",
        ],
    },
    author="GraniLuk",
    description="Convert a Markdown file or URL to EPUB and email it to your Kindle",
    long_description=open("README.md", "r", encoding="utf-8").read(),
    long_description_content_type="text/markdown",
)
