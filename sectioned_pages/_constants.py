"""Common literal values used across sectioned_pages.

These constants keep directory names and labels centralized so the loader,
generator, and tests can import the same values without drifting. Intended for
internal use within the sectioned_pages package.

Examples
--------
>>> from sectioned_pages import _constants
>>> _constants.CONFIG_DIRNAME
'.config'
>>> _constants.ASSETS_DIRNAME
'assets'
"""

CONFIG_DIRNAME = ".config"
ASSETS_DIRNAME = "assets"
HOME_LABEL = "Home"
