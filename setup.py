"""Set-up file for uvtheory for installations using ``pip install .``"""
from setuptools import find_packages, setup


with open("requirements.txt") as f:
    required = f.read().splitlines()


setup(
    name="uvtheory",
    version="0.1.0",
    license="GPL",
    keywords=["equation of state mie fluid perturbation theory helmholtz energy"],
    install_requires=required,
    extras_require={"testing": ["pytest", "sympy"]},
    description="Residual Helmholtz energy of Mie fluid mixtures with UV theory",
    platforms=["Linux", "Windows", "Mac OS-X"],
    packages=find_packages("src"),
    package_dir={"": "src"},
    zip_safe=False,
)
