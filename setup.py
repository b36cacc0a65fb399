"""Setup script for Qalendr, the holiday and special-day calendar generator."""

from pathlib import Path

from setuptools import find_packages, setup

# Read the README file
readme_file = Path(__file__).parent / "README.md"
long_description = readme_file.read_text(encoding="utf-8") if readme_file.exists() else ""

# Read requirements, separating the test tooling
requirements_file = Path(__file__).parent / "requirements.txt"
requirements = []
dev_requirements = []

if requirements_file.exists():
    content = requirements_file.read_text().strip()
    lines = content.split("\n")

    for line in lines:
        line = line.strip()
        # Skip empty lines and comments
        if not line or line.startswith("#"):
            continue

        # Separate development dependencies
        if "pytest" in line or "development" in line.lower() or "testing" in line.lower():
            dev_requirements.append(line)
        else:
            requirements.append(line)

setup(
    name="qalendr",
    version="1.0.0",
    description="Holiday, school holiday and special-day calendars as ICS subscriptions",
    long_description=long_description,
    long_description_content_type="text/markdown",
    author="Qalendr Team",
    # Package configuration
    packages=find_packages(include=["qalendr", "qalendr.*"]),
    include_package_data=True,
    # Dependencies
    install_requires=requirements,
    extras_require={
        "test": dev_requirements,
        "dev": dev_requirements
        + [
            "black>=23.0.0",
            "isort>=5.12.0",
            "mypy>=1.0.0",
        ],
    },
    python_requires=">=3.9",
    classifiers=[
        "Development Status :: 4 - Beta",
        "Environment :: Console",
        "Environment :: Web Environment",
        "License :: OSI Approved :: MIT License",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.9",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
        "Topic :: Office/Business :: Scheduling",
        "Framework :: AsyncIO",
    ],
    keywords="calendar ics icalendar holidays school-holidays bridge-days aiohttp",
    entry_points={
        "console_scripts": [
            "qalendr=qalendr.__main__:main",
        ],
    },
    # Bundled record tables
    package_data={
        "qalendr": [
            "data/resources/*.json",
            "data/resources/*/*.json",
            "data/resources/*/*/*.json",
            "data/resources/*/*/*/*.json",
        ],
    },
    zip_safe=False,
)
