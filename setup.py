import setuptools

install_requires = [
    "av>=14.0.0",
]

extras_require = {
    "dev": [
        "coverage[toml]>=7.2.2",
        "mypy",
        "ruff",
    ],
}

setuptools.setup(
    name="vp9parser",
    version="0.1.0",
    description="A parser for VP9 frame headers and superframe indices",
    license="BSD-3-Clause",
    classifiers=[
        "Development Status :: 3 - Alpha",
        "Intended Audience :: Developers",
        "Operating System :: OS Independent",
        "Programming Language :: Python",
        "Programming Language :: Python :: 3",
        "Topic :: Multimedia :: Video",
    ],
    python_requires=">=3.9",
    package_dir={"": "src"},
    packages=setuptools.find_packages("src"),
    install_requires=install_requires,
    extras_require=extras_require,
)
