# -*- coding: utf-8 -*-
import setuptools
import pathlib
import site
import sys

# odd bug with develop (editable) installs, see: https://github.com/pypa/pip/issues/7953
site.ENABLE_USER_SITE = "--user" in sys.argv[1:]

# The eGrabber python binding (`egrabber`) ships with the Euresys eGrabber SDK
# and is not on PyPI; install the SDK's wheel to talk to real hardware.
required = [
    "mashumaro",
    "simplejson>= 3.19.2",
    "loguru",
    "rich>=13.0.0",
    "click>=8.0.0",
    "click-option-group",
]

extras = {
    "test": ["pytest", "doit"],
}

here = pathlib.Path(__file__).parent.resolve()

long_description = (here / "README.md").read_text(encoding="utf-8")

# Read version
version = {}
with open("src/grabberconf/_version.py", "r") as f:
    exec(f.read(), version)

if __name__ == "__main__":
    setuptools.setup(
        name="grabberconf",
        version=version["__version__"],
        description="Configuration profiles for cameras on Euresys frame grabbers.",
        long_description=long_description,
        long_description_content_type="text/markdown",
        keywords=[
            "eGrabber",
            "GenICam",
            "Frame grabber",
            "Camera",
            "CoaXPress",
        ],
        classifiers=[
            "License :: OSI Approved :: MIT License",
            "Development Status :: 2 - Pre-Alpha",
        ],
        license="MIT",
        package_dir={"": "src"},
        packages=setuptools.find_packages(
            where="src",
            exclude=["*.test", "*.test.*", "test.*", "test", "test_*"],
        ),
        entry_points={
            "console_scripts": [
                "grabberconf=grabberconf.cli:cli",
            ],
        },
        install_requires=required,
        extras_require=extras,
        python_requires=">= 3.11",
        setup_requires=["wheel"],  # force install of wheel first
    )
