from setuptools import find_packages, setup

setup(
    name="photo-dedupe",
    version="0.1.0",
    description="In-memory duplicate and near-duplicate detection for photo collections",
    package_dir={"": "src"},
    packages=find_packages("src"),
    python_requires=">=3.10",
    install_requires=[
        "Pillow>=10.0",
        "ImageHash>=4.3",
        "numpy>=1.24",
    ],
    extras_require={
        "heif": ["pillow-heif>=0.13"],
        "test": ["pytest>=7.0"],
    },
)
