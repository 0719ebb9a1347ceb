"""
Setup script for md-pdf-service.

Allows development installation with `pip install -e .[test]`
"""

from setuptools import setup, find_packages

setup(
    name="md-pdf-service",
    version="0.1.0",
    packages=find_packages(include=["md_pdf_service", "md_pdf_service.*"]),
    python_requires=">=3.11",
    install_requires=[
        "fastapi>=0.110",
        "uvicorn>=0.27",
        "pydantic>=2.5",
        "pydantic-settings>=2.1",
        "markdown-it-py>=3.0",
    ],
    extras_require={
        "test": [
            "pytest>=7.4",
            "httpx>=0.27",
        ],
    },
    entry_points={
        "console_scripts": [
            "md-pdf-service=md_pdf_service.main:main",
        ],
    },
)
