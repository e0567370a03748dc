"""SQLite 인메모리 DB 를 사용하는 통합 테스트."""
