from fulfillment.jobs.department_transfer import DepartmentTransferJob

__all__ = ["DepartmentTransferJob"]
