import os

from setuptools import find_packages, setup

README = os.path.join(os.path.dirname(__file__), "README.md")


def readme() -> str:
    with open(README, encoding="utf-8") as f:
        return f.read()


setup(
    name="java_ddd_codegen",
    version="1.0.0",
    description="Generate a Java DDD domain model (aggregates, entities, value objects) from a domain model schema",
    long_description=readme(),
    long_description_content_type="text/markdown",
    classifiers=[
        "Development Status :: 4 - Beta",
        "License :: OSI Approved :: MIT License",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.12",
        "Topic :: Software Development :: Code Generators",
        "Intended Audience :: Developers",
    ],
    keywords="ddd domain driven design java code generation aggregate value object template",
    url="https://github.com/madlag/java_ddd_codegen",
    author="François Lagunas",
    author_email="francois.lagunas@gmail.com",
    license="MIT",
    packages=find_packages(),
    python_requires=">=3.11",
    install_requires=[
        "click>=8.0.0",
        "jinja2>=3.0.0",
    ],
    extras_require={
        "dev": [
            "pytest>=7.0.0",
            "pytest-cov>=4.0.0",
            "black>=23.0.0",
            "ruff>=0.1.0",
        ],
    },
    entry_points={
        "console_scripts": [
            "java_ddd_codegen=java_ddd_codegen.java_ddd_codegen:java_ddd_codegen",
        ],
    },
    include_package_data=True,
    package_data={
        "java_ddd_codegen": ["templates/**/*.jinja2"],
    },
    zip_safe=False,
)
