"""
Pydantic models for jiezi results.

These models give segmentation output a stable, serializable shape:
- Token offsets for highlighting and indexing
- Automatic JSON serialization (used by the CLI's --json output)

Usage:
    from jiezi.models import Token, SegmentationResult

    tokens = jiezi.tokenize("永和服装饰品有限公司")
    result = SegmentationResult.from_tokens("永和服装饰品有限公司", tokens)
    print(result.model_dump_json())
"""

from typing import Iterable, List, Tuple, Union

from pydantic import BaseModel, Field


class Token(BaseModel):
    """
    A single token with its character offsets in the input.
    """
    word: str = Field(..., description="Token text")
    start: int = Field(..., ge=0, description="Start offset (characters, inclusive)")
    end: int = Field(..., ge=0, description="End offset (characters, exclusive)")

    class Config:
        frozen = True

    @classmethod
    def from_tuple(cls, item: Tuple[str, int, int]) -> "Token":
        word, start, end = item
        return cls(word=word, start=start, end=end)

    def as_tuple(self) -> Tuple[str, int, int]:
        return self.word, self.start, self.end

    @property
    def width(self) -> int:
        return self.end - self.start


class SegmentationResult(BaseModel):
    """
    Segmentation of one text.

    Example response:
        {
            "text": "我来到北京清华大学",
            "tokens": [
                {"word": "我", "start": 0, "end": 1},
                {"word": "来到", "start": 1, "end": 3},
                {"word": "北京", "start": 3, "end": 5},
                {"word": "清华大学", "start": 5, "end": 9}
            ],
            "count": 4
        }
    """
    text: str = Field(..., description="Input text")
    tokens: List[Token] = Field(default_factory=list, description="Tokens in output order")
    count: int = Field(0, description="Number of tokens")

    @classmethod
    def from_tokens(
        cls,
        text: str,
        tokens: Iterable[Union[Token, Tuple[str, int, int]]],
    ) -> "SegmentationResult":
        """
        Create a SegmentationResult from Token objects or (word, start, end) tuples.
        """
        items = [t if isinstance(t, Token) else Token.from_tuple(t) for t in tokens]
        return cls(text=text, tokens=items, count=len(items))

    def words(self) -> List[str]:
        """Token texts in order."""
        return [t.word for t in self.tokens]
