"""Nexflow Credentials Meta information.
   Nexflow Credentials encrypts third-party OAuth tokens before they are stored.
"""
__title__ = 'nexflow_credentials'
__description__ = (
   'Nexflow Credentials encrypts third-party OAuth tokens '
   'before they are stored.'
)
__version__ = '0.1.0'
__license__ = 'Apache-2.0'
