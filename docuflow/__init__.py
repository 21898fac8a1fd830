"""
DocuFlow console: document management with role-based permissions.
"""
