"""
Feature packages: browser (scan), export (serializers), ui (HTML).
"""
