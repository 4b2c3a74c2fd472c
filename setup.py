from setuptools import setup, find_packages
setup(
    name='jobserv-api',
    version='5.0.0',
    package_dir={'': 'src'},
    packages=find_packages(where='src'),
    include_package_data=True,
    package_data={
        'jobserv_api': [
            'config/*.yaml',
            'config/*.ini',
        ],
    },
    description='Client library for the JobServ build and OTA orchestration API.',
    author='Your Name',
    author_email='youremail@example.com',
    install_requires=[
        'invoke>=2.0.0',
        'pyyaml>=6.0',
        'requests>=2.25.0',
        'pydantic>=2.0.0',
        'fastapi>=0.100.0',
        'httpx>=0.24.0',  # required by fastapi.testclient
    ],
    extras_require={
        'test': [
            'pytest>=7.0.0',
        ],
    },
)
