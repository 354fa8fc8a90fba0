"""Configuration shipped with tb-install (the ``classpath:/`` location)."""
