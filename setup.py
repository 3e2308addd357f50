from setuptools import setup, find_packages

setup(
    name="cdmistore",
    version="1.0.0",
    packages=find_packages(where="src"),
    package_dir={"": "src"},
    python_requires=">=3.9",
    install_requires=[
        "PyYAML",
    ],
    extras_require={
        "test": ["pytest"],
    },
    entry_points={
        "console_scripts": [
            "cdmistore=cdmistore.dataobjectstoreclient:main",
        ],
    },
)
