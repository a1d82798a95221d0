"""HTTP surface of the Placement Tracker."""
