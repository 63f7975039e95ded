import os
import re

from setuptools import setup

here = os.path.dirname(os.path.abspath(__file__))

with open(os.path.join(here, "geomspec", "_version.py")) as f:
    version = re.search(r'^__version__ = "([^"]+)"', f.read(), re.M).group(1)

extras_require = {
    "test": ["pytest"],
}

setup(
    name="geomspec",
    version=version,
    description="Decode GeoJSON feature collections into a typed, validated geometry tree",
    license="BSD",
    packages=["geomspec"],
    package_data={"geomspec": ["py.typed"]},
    python_requires=">=3.9",
    install_requires=["msgspec>=0.18"],
    extras_require=extras_require,
    zip_safe=False,
)
