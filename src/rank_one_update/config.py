from pydantic import BaseModel


class UpdateConfig(BaseModel):
    """
    Options controlling the checks run before a rank-one update mutates anything.

    Attributes:
        check_structure (bool): Verify that the strictly-upper triangle of $L$ is
            zero, that a Cholesky diagonal has no zero entry and that $D$ is a
            strictly positive diagonal.
        check_finite (bool): Reject factors and update vectors holding NaN or Inf.
    """

    model_config = {"frozen": True}

    check_structure: bool = True
    check_finite: bool = True


DEFAULT_CONFIG = UpdateConfig()
