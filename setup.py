"""
Packaging script for PyPI.
"""
import setuptools

setuptools.setup(
	name='casework-lang',
	author='The casework authors',
	version='0.0.1',
	packages=['casework', "casework.static", ],
	license='MIT',
	description='A static type checker for a little Scheme with variant types and type-case',
	long_description=open('README.md').read(),
	long_description_content_type="text/markdown",
	classifiers=[
		"Programming Language :: Python :: 3.9",
		"License :: OSI Approved :: MIT License",
		"Operating System :: OS Independent",
		"Development Status :: 3 - Alpha",
		"Intended Audience :: Developers",
		"Intended Audience :: Education",
		"Topic :: Software Development :: Compilers",
		"Topic :: Education",
    ],
	python_requires='>=3.9',
	install_requires=[
		"booze-tools>=0.6.2.1",
	]
)
