"""레포지토리 패키지 — 데이터베이스 쿼리 계층.

Repository package — Database query layer.
``user_repository`` owns user lookups and the session-hash UPDATEs;
``cart_repository`` and ``profile_repository`` create the rows that
accompany every user; ``address_repository`` serves per-user addresses.
"""
