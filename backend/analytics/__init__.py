# 效率统计引擎：周窗口、聚合、连续天数、效率分、趋势、建议、排行榜
