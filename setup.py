from setuptools import setup, find_packages

setup(
    name="stockdigest",
    version="0.1.0",
    packages=find_packages(include=["common", "common.*", "stockdigest", "stockdigest.*"]),
    install_requires=[
        "fastapi",
        "uvicorn",
        "pydantic>=2",
        "pydantic-settings",
        "sqlalchemy>=2",
        "psycopg2-binary",
        "telethon",
        "celery",
        "redis",
        "loguru",
        "pytz",
        "python-dotenv",
        "chardet",
        "google-generativeai",
        "tenacity",
        "youtube-transcript-api>=1.0",
    ],
    extras_require={
        "test": [
            "pytest",
            "pytest-asyncio",
            "httpx",
        ],
    },
    python_requires=">=3.11",
)
