from setuptools import setup, find_packages

setup(
    name="bpm_estimator",
    version="0.1.0",
    packages=find_packages(exclude=["tests", "tests.*"]),
    py_modules=["estimate_bpm_cli"],
    install_requires=[
        "numpy",
        "librosa",
    ],
    extras_require={
        'test': [
            "pytest",
            "soundfile",
        ],
    },
    entry_points={
        'console_scripts': [
            'estimate-bpm=estimate_bpm_cli:main',
        ],
    },
    python_requires='>=3.8',
    description="Tool to estimate the tempo of recorded music from onset intervals",
    author="Dance to Beat",
)
