from __future__ import annotations

from setuptools import find_namespace_packages, setup

setup(
    name="watchlist-gateway",
    version="0.1.0",
    # Repo convention: backend code lives under `backend/`, and each layer is a
    # top-level import (`domain`, `application`, `infrastructure`, `config`, `server`).
    package_dir={"": "backend"},
    packages=find_namespace_packages(
        where="backend",
        include=[
            "domain",
            "domain.*",
            "application",
            "application.*",
            "infrastructure",
            "infrastructure.*",
            "config",
            "config.*",
            "server",
            "server.*",
        ],
    ),
    python_requires=">=3.10",
    install_requires=[
        "pydantic==2.10.6",
        "python-dotenv>=1.0",
        "asyncpg>=0.29",
    ],
    extras_require={
        # Local HTTP command surface for the desktop client.
        "server": [
            "fastapi>=0.110",
            "uvicorn>=0.27",
        ],
        # Test runner deps (unittest is stdlib; TestClient needs httpx; server.main imports uvicorn).
        "test": [
            "fastapi>=0.110",
            "uvicorn>=0.27",
            "httpx>=0.27",
            "pytest>=8.0",
        ],
        "full": [
            "fastapi>=0.110",
            "uvicorn>=0.27",
        ],
    },
)
