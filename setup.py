import setuptools


def long_description():
    with open('README.md', 'r') as file:
        return file.read()


setuptools.setup(
    name='sysdns',
    version='0.1.0',
    description='Discover the DNS nameservers configured on this host',
    long_description=long_description(),
    long_description_content_type='text/markdown',
    author='Gerald',
    author_email='i@gerald.top',
    license='MIT',
    classifiers=[
        'Intended Audience :: Developers',
        'License :: OSI Approved :: MIT License',
        'Operating System :: POSIX',
        'Operating System :: Microsoft :: Windows',
        'Programming Language :: Python :: 3.9',
        'Programming Language :: Python :: 3.10',
        'Programming Language :: Python :: 3.11',
        'Programming Language :: Python :: 3.12',
        'Programming Language :: Python :: 3 :: Only',
    ],
    keywords='dns nameserver resolv.conf',
    python_requires='>=3.9',
    test_suite='tests',
    packages=setuptools.find_packages(exclude=['tests', 'tests.*']),
)
