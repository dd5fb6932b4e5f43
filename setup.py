import re
from setuptools import setup, find_packages

with open("./README.md", "r") as f:
    description = f.read()

with open("./requirements.txt", 'r') as f:
    requirements = f.read().splitlines()

with open("./pocketcube/__init__.py", 'r') as f:
    metadata = dict(re.findall(r'^__(\w+)__ = "([^"]*)"', f.read(), re.M))

setup(
    name="pocketcube",
    version=metadata["version"],
    author=metadata["author"],
    author_email='singhvi.vivaan@gmail.com',
    description="An optimal solver for the 2x2 Rubik's cube backed by a complete state table",
    long_description=description,
    long_description_content_type="text/markdown",
    license='MIT',
    packages=find_packages(exclude=["tests", "tests.*"]),
    python_requires='>=3.10',
    include_package_data=True,
    install_requires=requirements,
    extras_require={"test": ["pytest"]}
)
