# src/geometry/bvh.py
import logging
import math
from typing import List, Optional, Sequence

import numpy as np

from core.aabb import AABB
from core.interval import Interval
from core.ray import Ray
from geometry.hittable import Hittable, HitRecord

logger = logging.getLogger(__name__)

# Number of centroid buckets evaluated by the surface area heuristic.
NUM_BUCKETS = 12

# Centroid spread below which all items are treated as coincident.
DEGENERATE_EXTENT = 1e-12


def _centroid_key(axis: int):
    def key(obj):
        return obj.bounding_box().centroid(axis)
    return key


def _median_split(objects: list, start: int, end: int, axis: int) -> int:
    # Python's sort is stable, so equal centroids keep their input order.
    objects[start:end] = sorted(objects[start:end], key=_centroid_key(axis))
    return start + (end - start) // 2


def _sah_split(objects: list, start: int, end: int, axis: int) -> int:
    """
    Partitions objects[start:end] in place along axis and returns the index
    of the first object of the right half.
    """
    items = objects[start:end]
    centroids = [obj.bounding_box().centroid(axis) for obj in items]
    c_min = min(centroids)
    c_max = max(centroids)
    extent = c_max - c_min
    if not extent >= DEGENERATE_EXTENT:
        return _median_split(objects, start, end, axis)

    # Bin objects by centroid.
    counts = [0] * NUM_BUCKETS
    boxes = [AABB.EMPTY] * NUM_BUCKETS
    buckets = []
    scale = NUM_BUCKETS / extent
    for obj, c in zip(items, centroids):
        b = min(NUM_BUCKETS - 1, int((c - c_min) * scale))
        buckets.append(b)
        counts[b] += 1
        boxes[b] = AABB.surrounding_box(boxes[b], obj.bounding_box())

    # Left-to-right sweep: box and count of buckets [0, i].
    left_boxes = []
    left_counts = []
    box, count = AABB.EMPTY, 0
    for i in range(NUM_BUCKETS - 1):
        box = AABB.surrounding_box(box, boxes[i])
        count += counts[i]
        left_boxes.append(box)
        left_counts.append(count)

    # Right-to-left sweep: box and count of buckets [i + 1, NUM_BUCKETS).
    right_boxes = [None] * (NUM_BUCKETS - 1)
    right_counts = [0] * (NUM_BUCKETS - 1)
    box, count = AABB.EMPTY, 0
    for i in range(NUM_BUCKETS - 1, 0, -1):
        box = AABB.surrounding_box(box, boxes[i])
        count += counts[i]
        right_boxes[i - 1] = box
        right_counts[i - 1] = count

    best_cost = math.inf
    best_split = -1
    for i in range(NUM_BUCKETS - 1):
        n_left, n_right = left_counts[i], right_counts[i]
        if n_left == 0 or n_right == 0:
            continue
        cost = (left_boxes[i].surface_area() * n_left
                + right_boxes[i].surface_area() * n_right)
        if cost < best_cost:
            best_cost = cost
            best_split = i

    if best_split < 0 or not math.isfinite(best_cost):
        return _median_split(objects, start, end, axis)

    left = [obj for obj, b in zip(items, buckets) if b <= best_split]
    right = [obj for obj, b in zip(items, buckets) if b > best_split]
    if not left or not right:
        return _median_split(objects, start, end, axis)

    objects[start:end] = left + right
    return start + len(left)


class BVHNode(Hittable):
    """
    Binary bounding volume hierarchy over a list of hittables.

    Leaves hold one or two primitives directly in left/right (a single
    primitive is stored in both slots); internal nodes own two BVHNode
    children. The tree is immutable once built.
    """
    def __init__(self, objects: list, start: int = 0, end: Optional[int] = None):
        if end is None:
            end = len(objects)
        object_span = end - start

        self.box = AABB.EMPTY
        for i in range(start, end):
            self.box = AABB.surrounding_box(self.box, objects[i].bounding_box())

        if object_span == 0:
            self.left = self.right = None
            self.is_leaf = True
            return

        if object_span == 1:
            self.left = self.right = objects[start]
            self.is_leaf = True
            return

        if object_span == 2:
            self.left = objects[start]
            self.right = objects[start + 1]
            self.is_leaf = True
            return

        axis = self.box.longest_axis()
        mid = _sah_split(objects, start, end, axis)

        self.left = BVHNode(objects, start, mid)
        self.right = BVHNode(objects, mid, end)
        self.is_leaf = False

    @classmethod
    def from_list(cls, world) -> "BVHNode":
        """
        Builds a tree over the members of a HittableList (or any iterable)
        without reordering the caller's list.
        """
        objects = list(world)
        logger.info("Building BVH for %d objects", len(objects))
        root = cls(objects)
        logger.info("BVH built: %d nodes, depth %d", root.node_count(), root.depth())
        return root

    def hit(self, ray: Ray, ray_t: Interval) -> Optional[HitRecord]:
        if self.left is None or not self.box.hit(ray, ray_t):
            return None

        hit_left = self.left.hit(ray, ray_t)
        if self.right is self.left:
            return hit_left

        # The right subtree can only win with a closer hit.
        if hit_left is not None:
            hit_right = self.right.hit(ray, Interval(ray_t.min, hit_left.t))
        else:
            hit_right = self.right.hit(ray, ray_t)

        return hit_right if hit_right is not None else hit_left

    def bounding_box(self) -> AABB:
        return self.box

    def node_count(self) -> int:
        if self.is_leaf:
            return 1
        return 1 + self.left.node_count() + self.right.node_count()

    def depth(self) -> int:
        if self.is_leaf:
            return 1
        return 1 + max(self.left.depth(), self.right.depth())

    def primitives(self) -> List[Hittable]:
        """Leaf primitives in traversal order, each listed once."""
        if self.left is None:
            return []
        if self.is_leaf:
            return [self.left] if self.right is self.left else [self.left, self.right]
        return self.left.primitives() + self.right.primitives()


def flatten_bvh(bvh_root: BVHNode, primitives: Sequence[Hittable]):
    """
    Traverse and flatten the BVH tree into NumPy arrays suitable for GPU traversal.

    primitives is the flat primitive table the leaves index into.

    Returns six arrays:
      - bbox_min: (n,3) array of minimum coordinates.
      - bbox_max: (n,3) array of maximum coordinates.
      - left_indices: (n,) array (index of left child, or -1 for a leaf).
      - right_indices: (n,) array (index of right child, or -1 for a leaf).
      - is_leaf: (n,) int array (1 if leaf, 0 otherwise).
      - object_indices: (n,2) array of the primitive indices of a leaf (or -1).
    """
    index_of = {id(p): i for i, p in enumerate(primitives)}
    nodes = []

    def lookup(obj) -> int:
        index = index_of.get(id(obj), -1)
        if index < 0:
            logger.warning("Primitive %r is not in the primitive table, using -1", obj)
        return index

    def traverse(node: BVHNode) -> int:
        index = len(nodes)
        nodes.append(None)  # placeholder
        flat_node = {
            'bbox_min': [node.box.x.min, node.box.y.min, node.box.z.min],
            'bbox_max': [node.box.x.max, node.box.y.max, node.box.z.max],
            'left': -1,
            'right': -1,
            'is_leaf': 1 if node.is_leaf else 0,
            'objects': [-1, -1],
        }
        if node.is_leaf:
            if node.left is not None:
                flat_node['objects'] = [lookup(node.left), lookup(node.right)]
        else:
            flat_node['left'] = traverse(node.left)
            flat_node['right'] = traverse(node.right)
        nodes[index] = flat_node
        return index

    traverse(bvh_root)
    n = len(nodes)

    bbox_min = np.zeros((n, 3), dtype=np.float32)
    bbox_max = np.zeros((n, 3), dtype=np.float32)
    left_indices = -np.ones(n, dtype=np.int32)
    right_indices = -np.ones(n, dtype=np.int32)
    is_leaf = np.zeros(n, dtype=np.int32)
    object_indices = -np.ones((n, 2), dtype=np.int32)

    for i, node in enumerate(nodes):
        bbox_min[i] = node['bbox_min']
        bbox_max[i] = node['bbox_max']
        left_indices[i] = node['left']
        right_indices[i] = node['right']
        is_leaf[i] = node['is_leaf']
        object_indices[i] = node['objects']

    return bbox_min, bbox_max, left_indices, right_indices, is_leaf, object_indices
