# setup.py
from setuptools import setup, find_namespace_packages

setup(
    name="codeatlas",
    version="1.0.0",
    description="Indexador de proyectos JavaScript/TypeScript: árbol de ficheros, símbolos, imports, etiquetas y estadísticas",
    package_dir={"": "src"},
    packages=find_namespace_packages(where="src", include=["codeatlas*"]),  # Paquetes implícitos bajo src/
    python_requires=">=3.9",
    install_requires=[
        "tree-sitter>=0.22",
        "tree-sitter-typescript>=0.21",
        "requests",  # Envío del índice al sink HTTP (--publish)
    ],
    extras_require={
        "test": ["pytest"],
    },
    entry_points={
        'console_scripts': [
            'codeatlas=codeatlas.interface.cli.app:main',
        ],
    },
    classifiers=[
        "Programming Language :: Python :: 3",
        "Operating System :: OS Independent",
    ],
)
