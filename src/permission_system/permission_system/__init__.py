"""Permission System package.

Feature modules (accounts, permissions) each carry a thin Flask controller
layer on top of service and repository layers.
"""
