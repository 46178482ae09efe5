from fulfillment.models.app_setting import AppSetting

__all__ = ["AppSetting"]
