from setuptools import setup
import lucenequery

setup(
    name='lucenequery',
    version=lucenequery.__version__,
    description='Pythonic builder of lucene and solr query syntax.',
    long_description=open('README.md').read(),
    long_description_content_type='text/markdown',
    license='Apache Software License',
    packages=['lucenequery', 'lucenequery.engine', 'lucenequery.services'],
    extras_require={
        'rest': ['fastapi', 'pydantic>=2'],
        'graphql': ['strawberry-graphql>=0.30,<0.281', 'starlette'],
        'test': ['pytest', 'pytest-cov', 'httpx', 'fastapi', 'pydantic>=2', 'strawberry-graphql>=0.30,<0.281'],
    },
    python_requires='>=3.9',
    classifiers=[
        'Development Status :: 5 - Production/Stable',
        'Intended Audience :: Developers',
        'License :: OSI Approved :: Apache Software License',
        'Operating System :: OS Independent',
        'Programming Language :: Python :: 3',
        'Programming Language :: Python :: 3.9',
        'Programming Language :: Python :: 3.10',
        'Programming Language :: Python :: 3.11',
        'Programming Language :: Python :: 3.12',
        'Topic :: Internet :: WWW/HTTP :: Indexing/Search',
        'Topic :: Software Development :: Libraries :: Python Modules',
        'Topic :: Text Processing :: Indexing',
    ],
)
