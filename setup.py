from setuptools import setup, find_packages

setup(
    name="sehaty",
    version="0.1.0",
    packages=find_packages(include=["sehaty", "sehaty.*"]),
    install_requires=[
        "fastapi",
        "uvicorn",
        "sqlalchemy",
        "alembic",
        "psycopg2-binary",
        "python-jose[cryptography]",
        "python-multipart",
        "python-dotenv",
        "pydantic",
        "pydantic-settings",
        "prometheus-client",
        "prometheus-fastapi-instrumentator",
        "boto3",
        "pytest",
        "httpx",
    ],
)
