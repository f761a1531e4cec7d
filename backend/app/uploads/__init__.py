"""Photo upload handler.

Accepts a multipart batch of photos on ``POST /api/upload``, stores each
file in the configured object store under a timestamp-qualified key and
returns the public URL of every stored file.

Storing is sequential and a failure aborts the batch without removing the
files that were already stored.
"""
