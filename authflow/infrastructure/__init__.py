"""Infrastructure layer: Keycloak admin REST client and repositories."""
