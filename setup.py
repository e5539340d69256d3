from setuptools import setup, find_packages

setup(
    name="critical-css-inliner",
    version="1.0.0",
    packages=find_packages(),
    install_requires=[
        'aiofiles',
        'orjson',
        'chardet',
        'typing-extensions'
    ],
    extras_require={
        'test': [
            'pytest',
            'pytest-asyncio',
            'pytest-cov',
            'pytest-timeout',
            'pytest-xdist'
        ]
    },
    entry_points={
        'console_scripts': [
            'critical-css=critical_css.cli:main'
        ]
    },
    python_requires='>=3.8',
    author="Kenneth Hanks",
    author_email="fourfigs@gmail.com",
    description="Inline critical CSS into HTML build output after the build emits it",
    long_description=open('README.md').read(),
    long_description_content_type="text/markdown",
    url="https://github.com/fourfigs/critical-css-inliner",
    classifiers=[
        "Programming Language :: Python :: 3",
        "License :: OSI Approved :: MIT License",
        "Operating System :: OS Independent",
    ],
)
