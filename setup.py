from setuptools import setup, find_packages

setup(
    name="cleanhtml",
    version="0.1.0",
    author="Organized Crime and Corruption Reporting Project",
    packages=find_packages(exclude=["tests", "tests.*"]),
    package_dir={"cleanhtml": "cleanhtml"},
    include_package_data=True,
    python_requires=">=3.10",
    install_requires=[
        # When you use this in production, pin the dependencies!
        "beautifulsoup4>=4.13.4",
        "html5lib>=1.1",
        "servicelayer",
        "click>=8.2.1",
    ],
    extras_require={
        "dev": ["pytest"],
    },
    license="MIT",
    zip_safe=False,
    test_suite="tests",
    tests_require=["pytest"],
    entry_points={
        "console_scripts": ["cleanhtml = cleanhtml.cli:cli"],
    },
)
