"""UniScan attendance service.

The package is organized by feature modules (users, attendance) with a thin
Flask controller layer on top of service/repository layers.
"""
