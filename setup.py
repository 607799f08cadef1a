import setuptools

with open("README.md", "r") as fh:
	long_description = fh.read()

with open('VERSION', 'r') as fh:
	VERSION = fh.read().strip()

setuptools.setup(
	name="snowland",
	version=VERSION,
	description="Snowland desktop installer - Hyprland dotfiles, themes, fonts and Waybar helpers",
	long_description=long_description,
	long_description_content_type="text/markdown",
	packages=setuptools.find_packages(include=['snowland', 'snowland.*']),
	classifiers=[
		"Programming Language :: Python :: 3.12",
		"License :: OSI Approved :: GNU General Public License v3 (GPLv3)",
		"Operating System :: POSIX :: Linux",
	],
	python_requires='>=3.12',
	install_requires=[
		'pydantic>=2',
	],
	extras_require={
		'test': ['pytest'],
	},
	entry_points={
		'console_scripts': [
			'snowland-install = snowland:run_as_a_module',
			'snowland-updates = snowland:run_updates',
			'snowland-menu = snowland:run_menu',
		],
	},
)
