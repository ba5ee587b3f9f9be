"""Low-level value types shared by every other package: vectors, rays,
intervals, bounding boxes, orthonormal bases and random sampling helpers."""
