from setuptools import setup, find_packages

setup(
   name="scoped",
   version="0.1.0",
   author="Arthur Melin",
   python_requires=">=3.12",
   packages=find_packages(exclude=["tests", "tests.*"]),
   install_requires=[],
   extras_require={
       "test": [
           "pytest",
       ],
   },
)
