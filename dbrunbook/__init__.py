"""
dbrunbook - MySQL sandbox toolkit
=================================
Mock CSV generation, CSV import/export, mysqldump wrappers and timing helpers.
"""

__version__ = "0.1.0"
