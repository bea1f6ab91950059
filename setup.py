from setuptools import find_packages, setup

# Define core requirements
core_requirements = [
    "beautifulsoup4>=4.12.0",
    "pydantic>=2.5.0",
    "python-dotenv>=1.0.0",
    "requests>=2.28.2",
    "typer>=0.9.0",
    "urllib3>=1.26.0",
]

# Define development requirements
dev_requirements = [
    "pytest>=7.3.1",
]

setup(
    name="define",
    version="0.3.0",
    packages=find_packages(include=["define", "define.*"]),
    install_requires=core_requirements,
    extras_require={
        "dev": dev_requirements,
        "test": dev_requirements,
    },
    entry_points={
        "console_scripts": [
            "define=define.cli.main:run",
        ],
    },
    python_requires=">=3.9",
    description="Command-line dictionary that prints definitions from several online dictionary APIs",
    classifiers=[
        "Programming Language :: Python :: 3",
        "License :: OSI Approved :: MIT License",
        "Operating System :: OS Independent",
        "Environment :: Console",
    ],
)
