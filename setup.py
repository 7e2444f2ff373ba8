"""
===============================================================================
Setup Script for Project Packaging and Distribution
===============================================================================
Manages project metadata, dependencies, and distribution packaging.
"""

from setuptools import setup, find_packages

setup(
    name="artb-backend",  # Project name
    version="1.0.0",   # Version
    description="Artwork feedback backend: Gemini critique, survey capture and contact notifications",
    packages=find_packages(include=[
        "utils",
        "routes",
        "utils.*",
        "routes.*"
    ]),
    py_modules=["app", "wsgi"],
    include_package_data=True,
    install_requires=[
        "flask",
        "flask-cors",
        "werkzeug",
        "markupsafe",
        "pandas",
        "google-generativeai",
        "python-dotenv",
    ],
    extras_require={
        "test": ["pytest"],
    },
    entry_points={
        'console_scripts': [
            'artb=app:main',
        ],
    },
    classifiers=[
        "Programming Language :: Python :: 3",
        "Operating System :: OS Independent",
    ],
    python_requires='>=3.9',
)
