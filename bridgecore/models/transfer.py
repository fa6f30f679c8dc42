"""Transfer status models.

Read from the backend ``/chain/{chainSymbol}/{txId}`` endpoint. Amounts are
kept as the integer strings the backend sends; unknown fields are ignored.
"""

from __future__ import annotations

from pydantic import BaseModel, Field


class BridgeTransaction(BaseModel):
    """One on-chain leg of a transfer (the send or the receive)."""

    tx_id: str = Field(alias="txId")
    source_chain_id: int | None = Field(default=None, alias="sourceChainId")
    destination_chain_id: int | None = Field(default=None, alias="destinationChainId")
    fee: str | None = None
    amount: str | None = None
    virtual_amount: str | None = Field(default=None, alias="virtualAmount")
    block_time: int | None = Field(default=None, alias="blockTime")
    confirmations: int = 0
    confirmations_needed: int | None = Field(default=None, alias="confirmationsNeeded")
    # Numeric messenger id as reported by the backend
    messenger: int | str | None = None
    sender: str | None = None
    recipient: str | None = None

    model_config = {"populate_by_name": True, "frozen": True}


class TransferStatusResponse(BaseModel):
    """Progress of a cross-chain transfer.

    ``receive`` stays None until the destination leg has been observed.
    """

    tx_id: str = Field(alias="txId")
    source_chain_symbol: str = Field(alias="sourceChainSymbol")
    destination_chain_symbol: str = Field(alias="destinationChainSymbol")
    send_amount: str | None = Field(default=None, alias="sendAmount")
    send_amount_formatted: float | None = Field(default=None, alias="sendAmountFormatted")
    stable_fee: str | None = Field(default=None, alias="stableFee")
    source_token_address: str | None = Field(default=None, alias="sourceTokenAddress")
    destination_token_address: str | None = Field(default=None, alias="destinationTokenAddress")
    sender_address: str | None = Field(default=None, alias="senderAddress")
    recipient_address: str | None = Field(default=None, alias="recipientAddress")
    signatures_count: int = Field(default=0, alias="signaturesCount")
    signatures_needed: int | None = Field(default=None, alias="signaturesNeeded")
    send: BridgeTransaction | None = None
    receive: BridgeTransaction | None = None
    response_time: int | None = Field(default=None, alias="responseTime")

    model_config = {"populate_by_name": True, "frozen": True}

    @property
    def is_complete(self) -> bool:
        """True once the destination leg has been observed."""
        return self.receive is not None
