"""
Permission feature module.

Role permission matrix, the document authorization gate and route
protection dependencies.
"""
