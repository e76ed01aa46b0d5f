"""Background job modules for RQ workers."""
