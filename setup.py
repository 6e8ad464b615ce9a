from setuptools import setup, find_packages

setup(
    name="tilepath",
    version="0.1.0",
    description="Golden point route search over tile movement rules",
    python_requires=">=3.8",
    install_requires=[
        "numpy",
        "networkx",
    ],
    extras_require={
        "test": ["pytest"],
    },
    entry_points={
        "console_scripts": [
            "tilepath=tilepath.find_route:main",
        ],
    },
    zip_safe=False,
    packages=find_packages(include=["tilepath", "tilepath.*"]),
)
