# -*- coding: utf-8 -*-
from setuptools import setup

packages = \
['symhwilib',
 'symhwilib.devices',
 'symhwilib.devices.ledger_symbol',
 'symhwilib.devices.ledger_symbol.exception',
 'symhwilib.devices.ledger_symbol.ledgercomm',
 'symhwilib.devices.ledger_symbol.ledgercomm.interfaces']

package_data = \
{'': ['*']}

modules = \
['symhwi']
install_requires = \
['hidapi>=0.14.0',
 'semver>=3.0.1,<4.0.0',
 'typing-extensions>=4.4,<5.0']

extras_require = \
{'test': ['pytest>=7.0']}

entry_points = \
{'console_scripts': ['symhwi = symhwilib._cli:main']}

setup_kwargs = {
    'name': 'symhwi',
    'version': '0.1.0',
    'description': 'A library for signing Symbol transactions with hardware wallets',
    'long_description': "# Symbol Hardware Wallet Interface\n\nThe Symbol Hardware Wallet Interface is a Python library and command line tool for getting public keys and signatures from the Symbol app of a Ledger device.\nPython software can use the provided library (`symhwilib`). Software in other languages can execute the `symhwi` tool.\n\n## Install\n\n```\npip3 install .\n```\n\n## Usage\n\nList the connected devices with\n\n```\n./symhwi.py enumerate\n```\n\nThen issue commands to one of them:\n\n```\n./symhwi.py -d <path> getaccount --path \"44'/4343'/0'/0'/0'\"\n./symhwi.py -d <path> signtx \"44'/4343'/0'/0'/0'\" <transaction hex> <generation hash>\n```\n\nAll output is JSON sent to `stdout`. Use `tcp:127.0.0.1:9999` as the device path to talk to the Speculos emulator.\n",
    'author': 'None',
    'author_email': 'None',
    'maintainer': 'None',
    'maintainer_email': 'None',
    'url': 'None',
    'packages': packages,
    'package_data': package_data,
    'py_modules': modules,
    'install_requires': install_requires,
    'extras_require': extras_require,
    'entry_points': entry_points,
    'python_requires': '>=3.8',
}


setup(**setup_kwargs)
