"""Numbering-plan rules per country and the alias table used to reach them."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Mapping, Optional, Tuple


@dataclass(frozen=True)
class CountryRule:
    """Structural rule for one country's numbering plan.

    ``length_range`` counts the digits of the full E.164 number, dial code
    included.
    """

    name: str
    dial_code: str
    length_range: Tuple[int, int]
    area_codes: Tuple[str, ...] = ()
    mobile_indicator: Optional[str] = None
    leading_digits: Optional[str] = None

    @property
    def min_length(self) -> int:
        return self.length_range[0]

    @property
    def max_length(self) -> int:
        return self.length_range[1]

    def accepts_length(self, digit_count: int) -> bool:
        return self.min_length <= digit_count <= self.max_length


_MEXICO_AREA_CODES = tuple(
    """
    55 33 81 222 231 234 238 241 243 244 246 248 271 294 311 312 313 314 315 316 317 318
    321 322 323 324 325 326 327 328 329 331 332 333 334 341 342 343 344 345 346 347 348 349
    371 372 373 411 412 413 414 415 416 417 418 421 422 423 424 425 426 427 428 429 431 432
    433 434 435 436 437 438 441 442 443 444 445 446 447 448 449 451 452 453 454 455 456 457
    458 461 462 463 464 465 466 467 468 469 471 472 473 474 475 476 477 478 481 482 483 484
    485 486 487 488 493 494 495 496 497 498 499 531 532 533 534 535 536 537 538 539 581 582
    583 584 585 586 587 588 594 595 596 612 613 614 615 616 617 618 619 621 622 623 624 625
    626 627 628 629 631 632 633 634 635 636 637 638 639 641 642 643 644 645 646 647 648 649
    651 652 653 654 655 656 657 658 659 664 665 666 667 668 669 671 672 673 674 675 676 677
    678 679 681 682 683 684 685 686 687 688 689 691 692 693 694 695 696 697 698 699 711 712
    713 714 715 716 717 718 719 721 722 723 724 725 726 727 728 729 731 732 733 734 735 736
    737 738 739 741 742 743 744 745 746 747 748 749 751 752 753 754 755 756 757 758 759 761
    762 763 764 765 766 767 768 769 771 772 773 774 775 776 777 778 779 781 782 783 784 785
    786 787 788 789 791 792 793 794 795 796 797 798 799 811 812 813 814 815 816 817 818 819
    821 822 823 824 825 826 827 828 829 831 832 833 834 835 836 837 838 839 841 842 843 844
    845 846 847 848 849 851 852 853 854 855 856 857 858 859 861 862 863 864 865 866 867 868
    869 871 872 873 874 875 876 877 878 879 881 882 883 884 885 886 887 888 889 891 892 893
    894 895 896 897 898 899 911 912 913 914 915 916 917 918 919 921 922 923 924 925 926 927
    928 929 931 932 933 934 935 936 937 938 939 941 942 943 944 945 946 947 948 949 951 952
    953 954 955 956 957 958 959 961 962 963 964 965 966 967 968 969 971 972 973 974 975 976
    977 978 979 981 982 983 984 985 986 987 988 989 991 992 993 994 995 996 997 998 999
    """.split()
)


def _rule(name: str, dial_code: str, min_length: int, max_length: int, **extra) -> CountryRule:
    return CountryRule(name=name, dial_code=dial_code, length_range=(min_length, max_length), **extra)


COUNTRY_RULES: Mapping[str, CountryRule] = {
    rule.name: rule
    for rule in (
        # +54 9 <area> <local>: the 9 marks mobiles in international format
        _rule(
            "Argentina",
            "54",
            13,
            15,
            area_codes=("11", "221", "223", "261", "299", "341", "351", "379", "381", "385", "387"),
            mobile_indicator="9",
        ),
        _rule("Bolivia", "591", 11, 11),
        _rule("Brasil", "55", 12, 13),
        _rule("Chile", "56", 11, 11, mobile_indicator="9"),
        _rule("Colombia", "57", 12, 12, mobile_indicator="3"),
        _rule("Costa Rica", "506", 11, 11),
        _rule("Ecuador", "593", 12, 12),
        _rule("El Salvador", "503", 11, 11),
        _rule("Guatemala", "502", 11, 11),
        _rule("Mexico", "52", 12, 13, area_codes=_MEXICO_AREA_CODES),
        _rule("Panamá", "507", 11, 11),
        _rule("Paraguay", "595", 12, 12),
        _rule("Peru", "51", 11, 11, mobile_indicator="9"),
        _rule("Spain", "34", 11, 11, leading_digits="6789"),
        _rule("Uruguay", "598", 11, 11),
        _rule("USA", "1", 11, 11),
        _rule("Canada", "1", 11, 11),
        _rule("República Dominicana", "1", 11, 11, area_codes=("809", "829", "849")),
    )
}

COUNTRY_ALIASES: Mapping[str, str] = {
    "Argentina": "Argentina",
    "Bolivia": "Bolivia",
    "Brasil": "Brasil",
    "Brazil": "Brasil",
    "Chile": "Chile",
    "Colombia": "Colombia",
    "Costa Rica": "Costa Rica",
    "Ecuador": "Ecuador",
    "El Salvador": "El Salvador",
    "Guatemala": "Guatemala",
    "Mexico": "Mexico",
    "México": "Mexico",
    "Panamá": "Panamá",
    "Panama": "Panamá",
    "Paraguay": "Paraguay",
    "Peru": "Peru",
    "Perú": "Peru",
    "República Dominicana": "República Dominicana",
    "Republica Dominicana": "República Dominicana",
    "Dominican Republic": "República Dominicana",
    "Spain": "Spain",
    "España": "Spain",
    "Uruguay": "Uruguay",
    "USA": "USA",
    "Estados Unidos": "USA",
    "United States": "USA",
    "USA / Canadá": "USA",
    "Canada": "Canada",
    "Canadá": "Canada",
}

# Countries whose dial code is known but which carry no structural rule.
DIAL_CODE_ONLY: Mapping[str, str] = {
    "Venezuela": "58",
    "Honduras": "504",
    "Nicaragua": "505",
    "Cuba": "53",
    "Portugal": "351",
    "France": "33",
    "Italy": "39",
    "Germany": "49",
    "United Kingdom": "44",
}


def canonical_country(label: Optional[str]) -> str:
    """Return the canonical key for ``label``, or ``label`` itself if it has no alias."""

    if not label:
        return ""
    return COUNTRY_ALIASES.get(label, label)


def lookup(label: Optional[str]) -> Optional[CountryRule]:
    """Return the rule for a country label, or ``None`` when no structural rule exists."""

    return COUNTRY_RULES.get(canonical_country(label))


def dial_code_for(label: Optional[str]) -> Optional[str]:
    key = canonical_country(label)
    rule = COUNTRY_RULES.get(key)
    if rule is not None:
        return rule.dial_code
    return DIAL_CODE_ONLY.get(key)


def _build_dial_code_index() -> Dict[str, Tuple[str, ...]]:
    index: Dict[str, Tuple[str, ...]] = {}
    for name, rule in COUNTRY_RULES.items():
        index[rule.dial_code] = index.get(rule.dial_code, ()) + (name,)
    for name, code in DIAL_CODE_ONLY.items():
        index[code] = index.get(code, ()) + (name,)
    return index


_DIAL_CODE_INDEX = _build_dial_code_index()


def countries_for_dial_code(dial_code: str) -> Tuple[str, ...]:
    """Return every canonical country that can legitimately use ``dial_code``."""

    return _DIAL_CODE_INDEX.get(dial_code, ())


def rule_for_dial_code(dial_code: str) -> Optional[CountryRule]:
    """Return the first structural rule registered for ``dial_code``."""

    for name in countries_for_dial_code(dial_code):
        rule = COUNTRY_RULES.get(name)
        if rule is not None:
            return rule
    return None


__all__ = [
    "CountryRule",
    "COUNTRY_RULES",
    "COUNTRY_ALIASES",
    "DIAL_CODE_ONLY",
    "canonical_country",
    "countries_for_dial_code",
    "dial_code_for",
    "lookup",
    "rule_for_dial_code",
]
