"""
Domain logic: pure reducers for progress, URLs, history and jobs.
"""
