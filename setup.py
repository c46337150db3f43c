import setuptools

with open("README.md", "r", encoding="utf-8") as fh:
    long_description = fh.read()

setuptools.setup(
    name="breakcheck",
    version="0.1.0",
    description="check the archlinux news feed before an unattended upgrade",
    long_description=long_description,
    long_description_content_type="text/markdown",
    packages=setuptools.find_packages('src'),
    package_dir={'': 'src'},
    classifiers=[
        "Development Status :: 3 - Alpha",
        "Programming Language :: Python :: 3",
        "Operating System :: POSIX :: Linux",
    ],
    python_requires='>=3.8',
    entry_points={
        'console_scripts': [
            'breakcheck=breakcheck.main:main'
        ]
    },
    install_requires=[],
    extras_require={
        'test': ['pytest']
    },
)
