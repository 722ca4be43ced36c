from collections.abc import Iterable

from eth_typing import ChecksumAddress

from lendpair.cache import get_checksum_address
from lendpair.exceptions import NotApprovedBorrower, NotApprovedLender


class AccessControl:
    """
    Allow-lists checked at the boundary of each mutating action.

    An empty list leaves the corresponding role open to every address.
    """

    def __init__(
        self,
        *,
        approved_borrowers: Iterable[str] = (),
        approved_lenders: Iterable[str] = (),
    ) -> None:
        self.approved_borrowers = frozenset(
            get_checksum_address(address) for address in approved_borrowers
        )
        self.approved_lenders = frozenset(
            get_checksum_address(address) for address in approved_lenders
        )

    def is_approved_borrower(self, borrower: ChecksumAddress) -> bool:
        return not self.approved_borrowers or borrower in self.approved_borrowers

    def is_approved_lender(self, lender: ChecksumAddress) -> bool:
        return not self.approved_lenders or lender in self.approved_lenders

    def check_borrower(self, borrower: ChecksumAddress) -> None:
        if not self.is_approved_borrower(borrower):
            raise NotApprovedBorrower(borrower=borrower)

    def check_lender(self, lender: ChecksumAddress) -> None:
        if not self.is_approved_lender(lender):
            raise NotApprovedLender(lender=lender)
