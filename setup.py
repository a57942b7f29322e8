from __future__ import annotations

from setuptools import find_packages, setup

setup(
    name="movie-lookup",
    version="0.1.0",
    description="Async TMDB lookup client (titles, IMDb ids, TMDB ids) for chat bots.",
    # Repo convention: library code lives under `backend/`, imported as `movie_lookup`.
    package_dir={"": "backend"},
    packages=find_packages(where="backend", include=["movie_lookup", "movie_lookup.*"]),
    python_requires=">=3.10",
    install_requires=[
        "aiohttp>=3.9",
        "pydantic==2.10.6",
        "pyyaml>=6.0",
        "python-dotenv>=1.0",
    ],
    extras_require={
        "test": ["pytest>=7.0"],
    },
)
