# file: phonefmt/data/__init__.py
