from setuptools import setup, find_packages

setup(
    name="mesh_tour",
    version="0.1.0",
    description="Building and modifying quadrilateral and hexahedral meshes",
    author="Mesh Tour Team",
    packages=find_packages(where="src"),
    package_dir={"": "src"},
    python_requires=">=3.8",
    install_requires=[
        "numpy>=1.20",
        "scipy>=1.7",
        "matplotlib>=3.4",
        "meshio>=5.0",
    ],
    extras_require={
        "dev": ["pytest>=6.0"],
    },
)
