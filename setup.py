from setuptools import setup, find_packages
import os

setup(
    name="actuator_disk_model",
    version="0.1.0",
    packages=find_packages(
        where=".",
        include=["actuator_disk_model*"]
    ),
    install_requires=[
        line.strip() for line in open(os.path.join(os.path.dirname(os.path.abspath(__file__)), "requirements.txt"))
        if line.strip() and not line.startswith("#")
    ],
    extras_require={
        "test": ["pytest"],
    },
    python_requires=">=3.10",
    include_package_data=True,
)
