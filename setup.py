"""Setup script for the crbmnl e-ink status display server."""

from pathlib import Path

from setuptools import find_packages, setup

# Read the README file
readme_file = Path(__file__).parent / "README.md"
long_description = readme_file.read_text(encoding="utf-8") if readme_file.exists() else ""

# Read requirements, splitting test tooling into the dev/test extras
requirements_file = Path(__file__).parent / "requirements.txt"
requirements = []
dev_requirements = []

if requirements_file.exists():
    for line in requirements_file.read_text().strip().split("\n"):
        line = line.strip()
        # Skip empty lines and comments
        if not line or line.startswith("#"):
            continue

        if "pytest" in line:
            dev_requirements.append(line)
        else:
            requirements.append(line)

setup(
    name="crbmnl",
    version="0.1.0",
    description="Calendar and temperature status image server for TRMNL-style e-ink displays",
    long_description=long_description,
    long_description_content_type="text/markdown",
    author="crbmnl contributors",
    # Package configuration
    packages=find_packages(include=["crbmnl", "crbmnl.*"]),
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
        "Environment :: Web Environment",
        "Intended Audience :: End Users/Desktop",
        "License :: OSI Approved :: MIT License",
        "Operating System :: POSIX :: Linux",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.9",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
        "Topic :: Office/Business :: Scheduling",
        "Topic :: System :: Hardware",
        "Framework :: AsyncIO",
        "Framework :: aiohttp",
    ],
    keywords="calendar home-assistant e-ink trmnl bitmap display",
    entry_points={
        "console_scripts": [
            "crbmnl=crbmnl.__main__:main",
        ],
    },
    package_data={
        "crbmnl": ["fonts/*.ttf"],
    },
    zip_safe=False,
)
