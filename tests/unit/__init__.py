"""DB 없이 실행되는 단위 테스트."""
