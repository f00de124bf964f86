"""
setup.py: Setup script for the Tabletop Baseball Card Reader
"""

from setuptools import setup, find_packages

setup(
    name="card-reader",
    version="0.1.0",
    description="OCR extraction of tabletop baseball player cards",
    packages=find_packages(exclude=["scripts", "scripts.*"]),
    install_requires=[
        "opencv-python>=4.8.0",
        "Pillow>=10.0.0",
        "pytesseract>=0.3.10",
        "numpy>=1.24.0",
        "aiohttp>=3.9.0",
        "fastapi>=0.104.0",
        "uvicorn[standard]>=0.24.0",
        "python-multipart>=0.0.6",
        "slowapi>=0.1.9",
        "pydantic>=2.5.0",
        "click>=8.1.7",
        "python-dotenv>=1.0.0",
        "tqdm>=4.66.0",
    ],
    extras_require={
        'test': [
            "pytest>=7.4.0",
            "httpx>=0.25.0",
        ],
    },
    entry_points={
        'console_scripts': [
            'card-reader=cardreader.cli.main:cli',
        ],
    },
)
