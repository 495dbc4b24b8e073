import os
import os.path
import setuptools # type: ignore

root_path = os.path.dirname(__file__)

with open(os.path.join(root_path, "README.md"), "r") as fh:
    long_description = fh.read()

setuptools.setup(
    name="sabi",
    version="0.1.0",
    description="sabi: a script compiler and statement engine for line by line interactive stories.",
    long_description=long_description,
    long_description_content_type="text/markdown",
    packages=setuptools.find_packages(where="src"),
    package_dir={'': 'src'},

    package_data={
        'sabi': ['py.typed'],
        'sabi.compiler': ['*.lark'],
        'sabi.data': ['*.toml'],
    },
    include_package_data=True,
    zip_safe=False,
    classifiers=[
        "Programming Language :: Python :: 3",
        "Operating System :: OS Independent",
    ],
    install_requires=[
        "lark",
        "toml",
    ],
    extras_require={
        "test": [
            "pytest",
        ],
    },
    python_requires='>=3.11',
    entry_points={
        'console_scripts': [
            'sabi-play = sabi.console:main',
        ],
    },
)
