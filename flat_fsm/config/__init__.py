"""
Machine configuration: structural validation and YAML definition loading.
"""
