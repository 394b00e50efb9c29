"""Statistics recorder tests"""
