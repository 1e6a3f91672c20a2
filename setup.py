from setuptools import setup, find_packages

with open("README.md", "r", encoding="utf-8") as fh:
    long_description = fh.read()

setup(
    name='mimesniff',
    version='0.1.2',
    description='mime type detection by file extension and magic bytes',
    long_description=long_description,
    long_description_content_type="text/markdown",
    author='reserveword',
    author_email='reserveword@outlook.com',
    url='www.github.com/reserveword/mimesniff',
    packages=find_packages(where="src"),
    platforms='any',
    license='GPLv3+',
    classifiers=[
        "Programming Language :: Python :: 3",
        "License :: OSI Approved :: GNU General Public License v3 or later (GPLv3+)",
        "Operating System :: OS Independent",
    ],
    package_dir={"": "src"},
    install_requires=[],
    extras_require={
        'test': ['pytest', 'hypothesis'],
    },
    python_requires='>=3.11'
)
