import os

from setuptools import find_packages, setup

README = os.path.join(os.path.dirname(__file__), "README.md")


def readme() -> str:
    with open(README, encoding="utf-8") as f:
        return f.read()


setup(
    name="descriptor_to_code",
    version="1.0.1",
    description="Embed compiled protocol buffer file descriptors into generated Java and Python holders",
    long_description=readme(),
    long_description_content_type="text/markdown",
    classifiers=[
        "Development Status :: 4 - Beta",
        "License :: OSI Approved :: MIT License",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.12",
        "Topic :: Software Development :: Code Generators",
        "Topic :: Software Development :: Compilers",
        "Intended Audience :: Developers",
    ],
    keywords="protobuf protocol buffers descriptor code generation java python protoc plugin",
    url="https://github.com/madlag/descriptor_to_code",
    author="François Lagunas",
    author_email="francois.lagunas@gmail.com",
    license="MIT",
    packages=find_packages(),
    python_requires=">=3.11",
    install_requires=[
        "click>=8.0.0",
        "jinja2>=3.0.0",
        "protobuf>=5.26.0",
    ],
    extras_require={
        "dev": [
            "pytest>=7.0.0",
            "pytest-cov>=4.0.0",
            "black>=23.0.0",
            "ruff>=0.1.0",
        ],
        "test": [
            "pytest>=7.0.0",
        ],
    },
    entry_points={
        "console_scripts": [
            "descriptor_to_code=descriptor_to_code.descriptor_to_code:descriptor_to_code",
            "protoc-gen-descriptor=descriptor_to_code.plugin:main",
        ],
    },
    include_package_data=True,
    package_data={
        "descriptor_to_code": ["templates/**/*.jinja2"],
    },
    zip_safe=False,
)
