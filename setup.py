from setuptools import setup, find_packages
from setuptools_scm import get_version

def version():
    version = get_version(fallback_version='1.0.0')
    with open('src/hxcrepair/__init__.py', 'w') as f:
        f.write('__version__ = \'%s\'\n' % version)
    return version

setup(name = 'hxcrepair',
      python_requires = '>=3.8',
      version = version(),
      description = 'Repair missing sectors and stale offsets in HxC XML '
                    'disk layout dumps',
      install_requires = [],
      extras_require = {
          'test': ['pytest']
      },
      packages = find_packages('src'),
      package_dir = { '': 'src' },
      entry_points= {
          'console_scripts': ['hxc-repair=hxcrepair.cli:main']
      }
)
