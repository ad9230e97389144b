"""家庭档案库（人员 / 宠物 / 家庭）数据层。"""
__version__ = "0.1.0"
