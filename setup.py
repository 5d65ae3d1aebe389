from setuptools import find_packages, setup

with open("README.md", encoding="utf-8") as f:
    long_description = f.read()

setup(
    name="vimeonetworking",
    packages=find_packages(exclude=["tests", "tests.*"]),
    version="4.0.0",
    description="vimeonetworking: request serialization, authentication and typed models for the Vimeo API",
    author="Vimeo",
    python_requires=">=3.10",
    long_description=long_description,
    long_description_content_type="text/markdown",
    install_requires=[
        "requests",
        "urllib3",
        "python-dotenv",
        "click",
        "toml",
    ],
    extras_require={
        "dev": [
            "ruff>=0.9.6,<1.0.0",
            "mypy>=1.0.0,<2.0.0",
        ],
        "test": [
            "pytest",
        ],
    },
    license="MIT",
    zip_safe=False,
    keywords=["vimeo", "api", "oauth", "live", "streaming"],
    entry_points={
        "console_scripts": [
            "copy-vimeo-credentials-template=vimeonetworking.utils.copy_credentials_template:cli"
        ],
    },
)
