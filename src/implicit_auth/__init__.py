"""implicit-auth: OIDC implicit-flow sign-in for desktop applications.

Opens a provider-rendered login surface, harvests the id_token from the
redirect it navigates to, and verifies it against the provider's published
signing keys.
"""

__version__ = "0.1.0"
