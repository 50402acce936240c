# Payment functions service
