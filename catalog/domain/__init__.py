"""Domain models for the job catalog."""

from .models import ContractType, ExperienceLevel, JobRecord, RemoteType, SalaryType

__all__ = ["JobRecord", "SalaryType", "ContractType", "ExperienceLevel", "RemoteType"]
