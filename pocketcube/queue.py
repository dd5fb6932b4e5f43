from __future__ import annotations
from typing import Optional

import numpy as np

class CircularQueue:
    """
    A bounded FIFO of integers over a fixed numpy buffer.
    The head points to the oldest occupied cell, the tail to the next
    free cell, and both wrap around to the start of the buffer.
    Overflow and underflow are reported through the return values,
    the caller decides whether they are fatal.
    """

    def __init__(self, max_cells: int):
        assert max_cells > 0, "A queue needs room for at least one entry"
        self.__base = np.zeros(max_cells, dtype=np.int64)
        self.__max_cells = max_cells
        self.__head = 0
        self.__tail = 0
        self.__cells_used = 0

    @property
    def max_cells(self) -> int:
        return self.__max_cells

    def __len__(self) -> int:
        return self.__cells_used

    def is_empty(self) -> bool:
        return self.__cells_used == 0

    def is_full(self) -> bool:
        return self.__cells_used == self.__max_cells

    def enqueue(self, element: int) -> bool:
        """ Adds an element to the tail, returns False if the queue is full """
        if self.is_full():
            return False
        self.__base[self.__tail] = element
        self.__tail = (self.__tail + 1) % self.__max_cells
        self.__cells_used += 1
        return True

    def dequeue(self) -> Optional[int]:
        """ Removes and returns the head, None if the queue is empty """
        if self.is_empty():
            return None
        element = int(self.__base[self.__head])
        self.__head = (self.__head + 1) % self.__max_cells
        self.__cells_used -= 1
        return element

    def peek(self) -> Optional[int]:
        """ Returns the head without removing it, None if the queue is empty """
        if self.is_empty():
            return None
        return int(self.__base[self.__head])

    def enqueue_many(self, elements: np.ndarray) -> bool:
        """
        Adds every element in order, or none of them if they do not all fit.
        """
        elements = np.asarray(elements, dtype=np.int64).ravel()
        count = len(elements)
        if count > self.__max_cells - self.__cells_used:
            return False
        first = min(count, self.__max_cells - self.__tail)
        self.__base[self.__tail:self.__tail + first] = elements[:first]
        self.__base[:count - first] = elements[first:]
        self.__tail = (self.__tail + count) % self.__max_cells
        self.__cells_used += count
        return True

    def dequeue_many(self, count: int) -> np.ndarray:
        """
        Removes and returns up to count elements from the head, oldest first.
        """
        count = max(0, min(count, self.__cells_used))
        first = min(count, self.__max_cells - self.__head)
        elements = np.concatenate([
            self.__base[self.__head:self.__head + first],
            self.__base[:count - first]
        ])
        self.__head = (self.__head + count) % self.__max_cells
        self.__cells_used -= count
        return elements

    def __repr__(self) -> str:
        return f"CircularQueue({self.__cells_used}/{self.__max_cells})"
