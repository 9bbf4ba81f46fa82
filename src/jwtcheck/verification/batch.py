"""
Concurrent verification for asyncio hosts

Verification is CPU-bound and synchronous, so the batch verifier dispatches
each call onto an executor instead of blocking the event loop.
"""

import asyncio
import logging
from concurrent.futures import Executor
from typing import Any, Dict, Iterable, List, Optional, Sequence

from .extractor import extract_token
from .policies import build_key_chain
from .resolver import resolve
from .types import TrustedKey, VerificationContext, VerificationOutcome

logger = logging.getLogger(__name__)


class BatchVerifier:
    """Batch verification utility for many inputs against one key chain"""
    
    def __init__(
        self,
        keys: Sequence[TrustedKey],
        context: Optional[VerificationContext] = None,
        executor: Optional[Executor] = None
    ):
        self.keys = tuple(keys)
        self.context = context or VerificationContext()
        self.executor = executor
    
    async def verify(self, text: Any) -> VerificationOutcome:
        """Extract and verify one input on the executor"""
        loop = asyncio.get_running_loop()
        return await loop.run_in_executor(self.executor, resolve, text, self.keys, self.context)
    
    async def verify_batch(self, texts: Iterable[Any]) -> List[VerificationOutcome]:
        """
        Extract and verify many inputs concurrently
        
        Args:
            texts: Inputs that may contain tokens
            
        Returns:
            List[VerificationOutcome]: Outcomes in input order, with any
            failed verification reported as an invalid outcome
        """
        texts = list(texts)
        results = await asyncio.gather(
            *(self.verify(text) for text in texts),
            return_exceptions=True
        )
        
        outcomes = []
        for text, result in zip(texts, results):
            if isinstance(result, Exception):
                logger.error(f"Batch verification failed: {result}")
                outcomes.append(VerificationOutcome.failed(extract_token(text), f"verification error: {result}"))
            else:
                outcomes.append(result)
        
        return outcomes
    
    def get_batch_stats(self, outcomes: List[VerificationOutcome]) -> Dict[str, Any]:
        """
        Get batch verification statistics
        
        Args:
            outcomes: Verification outcomes
            
        Returns:
            dict: Batch statistics
        """
        total = len(outcomes)
        valid = len([o for o in outcomes if o.is_valid])
        not_found = len([o for o in outcomes if not o.token_found])
        
        return {
            'total': total,
            'valid': valid,
            'invalid': total - valid - not_found,
            'not_found': not_found,
            'success_rate': valid / total if total > 0 else 0,
        }


def create_batch_verifier(
    primary_key_pem: Optional[str],
    secondary_key_pem: Optional[str] = None,
    development_mode: bool = False,
    executor: Optional[Executor] = None
) -> BatchVerifier:
    """
    Create a batch verifier for the production/development key policy
    
    Returns:
        BatchVerifier: Batch verifier instance
    """
    return BatchVerifier(
        build_key_chain(primary_key_pem, secondary_key_pem),
        VerificationContext(development_mode=development_mode),
        executor
    )
