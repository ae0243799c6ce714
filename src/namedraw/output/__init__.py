"""Output layer — Rich/JSON rendering of ServiceResult and the live draw ticker."""
