# pydaptivenlms/_utils/__init__.py
