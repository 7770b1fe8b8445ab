from pydantic import BaseModel, ConfigDict, Field

REPORT_HEADER = [
    "Project",
    "Branch",
    "Contributors",
    "QualityGateStatus",
    "Bugs",
    "Vulnerabilities",
    "CodeSmells",
    "AnalysisDate",
    "URL",
]


class Row(BaseModel):
    """One project's main-branch snapshot."""

    model_config = ConfigDict(frozen=True)

    project: str
    branch: str
    contributor: str = ""
    quality_gate_status: str = ""
    bugs: int = Field(default=0, ge=0)
    vulnerabilities: int = Field(default=0, ge=0)
    code_smells: int = Field(default=0, ge=0)
    analysis_date: str = ""
    url: str = ""

    def to_record(self):
        """Return the row keyed by report column name."""
        return {
            "Project": self.project,
            "Branch": self.branch,
            "Contributors": self.contributor,
            "QualityGateStatus": self.quality_gate_status,
            "Bugs": self.bugs,
            "Vulnerabilities": self.vulnerabilities,
            "CodeSmells": self.code_smells,
            "AnalysisDate": self.analysis_date,
            "URL": self.url,
        }
