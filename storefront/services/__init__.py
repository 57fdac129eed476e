"""서비스 패키지 — 비즈니스 로직 계층.

Service package — Business logic layer.
``SessionService`` runs login, refresh-token rotation and logout;
``UserService`` runs signup and user management. Both depend on settings,
so they are built once in ``create_app`` and reached through ``app.state``.
``profile_service`` and ``address_service`` are stateless module singletons.
"""
