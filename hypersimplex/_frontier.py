"""Priority frontier over the live leaves of the partition tree."""
import heapq

from hypersimplex._exceptions import FrontierExhausted


class Frontier:
    """
    Binary heap of leaf simplices, most promising first.

    Entries are ordered by (-potential, depth, seq): highest potential, then
    the shallower leaf, then the leaf created first. The key of a node is read
    once on push, so a node's potential must not change while it is stored.
    """
    def __init__(self):
        self.heap = []

    def __len__(self):
        return len(self.heap)

    def __iter__(self):
        """Iterate over the leaves in no particular order."""
        return (entry[-1] for entry in self.heap)

    def push(self, node):
        if node.potential is None:
            raise ValueError(f"{node} has not been scored")
        heapq.heappush(self.heap, (-node.potential, node.depth, node.seq, node))

    def pop(self):
        try:
            return heapq.heappop(self.heap)[-1]
        except IndexError:
            raise FrontierExhausted("The frontier has no leaves left to "
                                    "split") from None

    def peek(self):
        if not self.heap:
            raise FrontierExhausted("The frontier is empty")
        return self.heap[0][-1]

    def max_potential(self):
        return self.peek().potential

    def volume(self):
        """Sum of the volumes of all leaves."""
        return sum(node.volume for node in self)
