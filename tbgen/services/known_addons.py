"""
Hand-maintained add-on lists used by the reports.

Ids are ATN add-on ids as strings.
"""

from __future__ import annotations

# Experiments confirmed to work in Thunderbird 91 despite having no upper limit.
KNOWN_TO_WORK_91: frozenset[str] = frozenset(
    """
    4631 15102 711780 640 4654 773590 634298 47144 195275 986258 986325 54035
    986338 386321 987716 708783 2533 3254 702920 4970 986685 438634 217293 1556
    1279 987798 987783 472193 902 330066 12018 56935 987934 646888 742199 12802
    987727 987740 367989 11646 2874 987900 987726 2561 986682 769143 1392 987775
    331666 987787 787632 3492 987779 987796 690062 546538 986610 559954 986632
    852623 987665 986523 986643 11005 987888 986372 987906 987908 1898 287743
    11727 46207 360086 987911 987914 10149 988035 987865 987933 988056 988138
    987902 987838 987979 988067 988098 987987 988057 987901 987928 988108 987757
    534258 987868 987664 987869 988096 987988 987915 988106 987976 987986 987989
    """.split()
)

KNOWN_TO_WORK_102: frozenset[str] = frozenset(
    {
        "986685",  # Phoenity Icons
        "4654",  # Remove Dupes
        "386321",  # Lightning calendar tabs
        "4970",  # tag-toolbar
        "56935",  # identity-chooser
    }
)

DEFAULT_KNOWN_TO_WORK: dict[str, frozenset[str]] = {
    "91": KNOWN_TO_WORK_91,
    "102": KNOWN_TO_WORK_102,
}

# add-on id -> link to the issue tracking the port
DEFAULT_WORK_IN_PROGRESS: dict[str, str] = {}
