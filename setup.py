from setuptools import find_packages, setup
import re
import os

# Read version from version.py without importing it
version_file = os.path.join("rowmapper", "version.py")
with open(version_file, "r") as f:
    version_content = f.read()

# Extract version using regex
version_match = re.search(r'__version__\s*=\s*["\']([^"\']+)["\']', version_content)
if not version_match:
    raise RuntimeError(f"Unable to find version string in {version_file}")
version = version_match.group(1)

setup(
    name="rowmapper",
    version=version,
    packages=find_packages(exclude=["tests", "tests.*"]),
    install_requires=[
        "python-dotenv>=0.19.0",
        "python-dateutil>=2.8.2",
    ],
    extras_require={
        "test": [
            "pytest",
            "pytest-mock",
            "pytest-cov",
            "freezegun",
        ]
    },
    python_requires=">=3.10",
    description="Map arbitrary Python objects onto rows of an in-memory table",
    long_description=open("README.md").read(),
    long_description_content_type="text/markdown",
    classifiers=[
        "Development Status :: 3 - Alpha",
        "Intended Audience :: Developers",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.10",
        "Topic :: Software Development :: Libraries :: Python Modules",
    ],
)
