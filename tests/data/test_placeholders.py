# Copyright 2026 Firefly Software Solutions Inc.
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.
"""Tests for PlaceholderAllocator — unique bind names per criteria."""

from pycriteria.data.placeholders import PLACEHOLDER_PREFIX, PlaceholderAllocator, placeholder


class TestPlaceholderAllocator:
    def test_starts_at_zero(self):
        allocator = PlaceholderAllocator()
        assert allocator.next_id == 0
        assert allocator.allocate() == "ACP0"

    def test_increments_by_one(self):
        allocator = PlaceholderAllocator()
        assert [allocator.allocate() for _ in range(3)] == ["ACP0", "ACP1", "ACP2"]
        assert allocator.next_id == 3

    def test_allocate_many(self):
        allocator = PlaceholderAllocator()
        allocator.allocate()
        assert allocator.allocate_many(2) == ["ACP1", "ACP2"]
        assert allocator.allocate_many(0) == []
        assert allocator.next_id == 3

    def test_no_leading_zeros(self):
        allocator = PlaceholderAllocator()
        names = allocator.allocate_many(11)
        assert names[-1] == "ACP10"

    def test_prefix(self):
        assert PLACEHOLDER_PREFIX == "ACP"

    def test_marker_format(self):
        assert placeholder("ACP7") == ":ACP7:"
