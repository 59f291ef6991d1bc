__factor_type__ = 'project'
identity = 'http://fault.io/python/locator'
name = 'locator'
abstract = 'Relative reference (path, query, and fragment) construction and resolution'
icon = '🧭'

fork = 'darpa'
versioning = 'continuous'
status = 'flux'

controller = 'fault.io'
contact = 'mailto:critical@fault.io'

#: Version tuple: (major, minor, patch)
version_info = (0, 1, 0)

#: The version string.
version = '.'.join(map(str, version_info))
