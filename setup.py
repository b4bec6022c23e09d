from setuptools import setup, find_packages  # ignore: type

setup(
    name="kb_dashboard",
    version="0.1.0",
    description="A read-only dashboard of the revisioned knowledge base indices in an Elasticsearch/OpenSearch cluster",
    packages=find_packages(exclude=("tests", "tests.*")),
    package_data={"kb_dashboard": ["views/*.j2"]},
    python_requires=">=3.10",
    install_requires=["requests", "pyyaml", "Click", "cerberus", "pydantic>=2", "fastapi", "jinja2", "uvicorn>=0.29"],
    extras_require={
        "test": ["pytest", "pytest-mock", "requests-mock", "httpx"],
    },
    entry_points={
        "console_scripts": [
            "kb-dashboard = kb_dashboard.cli:main",
        ],
    },
    classifiers=[
        "Development Status :: 3 - Alpha",
        "Intended Audience :: Developers",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.11",
        "License :: OSI Approved :: Apache Software License",
    ],
)
