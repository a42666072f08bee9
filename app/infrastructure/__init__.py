"""Infrastructure modules for the Weblate sync tool.

Centralized infrastructure components:
- i18n: Message catalogues, XLIFF serialization and catalogue merging
"""
