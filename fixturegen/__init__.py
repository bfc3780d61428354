"""
Round-robin fixture generator: participant registry, circle-method scheduler
and a small HTTP/CLI surface over them.
"""
